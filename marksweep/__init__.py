"""A small virtual machine heap with a mark-and-sweep garbage collector.

Modules: ``objects`` (heap object model), ``vm`` (the VM and collector),
``demo`` (scripted walkthrough) and ``cli`` (interactive session).
"""

__version__ = "0.1.0"
__all__ = ["objects", "vm", "demo", "cli"]