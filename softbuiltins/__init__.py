"""Software models of C memory routines over an emulated memory and shift-and-add multiplication."""

__version__ = "0.1.0"
__all__ = ["memimpl", "memory", "softmul"]