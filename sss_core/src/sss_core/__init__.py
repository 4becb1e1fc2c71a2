"""sss-core: Shamir secret sharing over a prime field."""
from .field import DEFAULT_MODULUS, PrimeField
from .orchestrator import ShareOrchestrator
from .shares import ShareBundle
from .version import __version__

__all__ = ["DEFAULT_MODULUS", "PrimeField", "ShareBundle", "ShareOrchestrator", "__version__"]
