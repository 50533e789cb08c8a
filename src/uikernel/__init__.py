"""Presentation/identity kernel shared by the widget catalog.

Sub-packages:
 - ``design``: class-name rule resolution and theme switching
 - ``services``: timing control, Qt host adapters, service registry, event bus
 - ``utils``: element id generation and small property helpers
 - ``config``: environment-bootstrapped settings
"""

__version__ = "0.1.0"
