"""Core building blocks shared across neo-loaders features."""
