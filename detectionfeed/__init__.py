"""detectionfeed: host detection feed controller.

Resolves a device id to alert ids, hydrates them into alert records and
keeps the expand/collapse state of the resulting list.
"""

__version__ = "0.1.0"
