"""
protoc-gen-swift

A protoc plugin that generates Swift sources from .proto definitions.
"""

# Version info
__version__ = "0.1.0"
