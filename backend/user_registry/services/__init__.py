"""Services Layer: the user registry and its process-wide singleton."""
