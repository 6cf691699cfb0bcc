from .networkx_adapter import ArchitectureGraph

__all__ = ["ArchitectureGraph"]
