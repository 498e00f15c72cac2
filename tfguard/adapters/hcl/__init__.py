"""
HCL adapter — parses Terraform native syntax into the document tree.
"""

from tfguard.adapters.hcl.errors import HclSyntaxError, SourceError
from tfguard.adapters.hcl.parser import parse
from tfguard.adapters.hcl.source import DirectorySource, InMemorySource

__all__ = [
    "DirectorySource",
    "HclSyntaxError",
    "InMemorySource",
    "SourceError",
    "parse",
]
