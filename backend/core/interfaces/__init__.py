# Interfaces (Abstract Contracts)
# Adapters implement these interfaces
from .services import GenerationClient, GenerationResult

__all__ = [
    "GenerationClient",
    "GenerationResult",
]
