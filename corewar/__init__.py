"""Core War: an assembler for champion programs and a virtual machine that runs them."""

__version__ = "0.1.0"