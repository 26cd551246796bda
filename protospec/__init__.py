"""Parser, data model and generator configuration for protobuf schema files."""

__version__ = "0.1.0"