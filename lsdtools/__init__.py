"""Hash tables, linked lists, and compact host-list and host-set handling."""

__version__ = "0.1.0"
__all__ = ["hashtable", "linkedlist", "hostrange", "parsing", "hostlist", "hostset"]