"""DeafSim - hearing loss simulator for LLM conversations."""

__version__ = "0.1.0"
