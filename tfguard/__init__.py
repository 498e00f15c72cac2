"""tfguard — version-constraint rules for Terraform configurations."""

__version__ = "0.1.0"
