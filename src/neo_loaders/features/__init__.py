"""Feature packages for neo-loaders."""
