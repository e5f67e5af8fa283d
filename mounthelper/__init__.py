# VeraCrypt Mount Helper
# Interactive wrapper that mounts a VeraCrypt container through the VeraCrypt CLI.
from .version import VERSION

__all__ = ["VERSION"]
