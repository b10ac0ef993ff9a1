"""Core package of SealBox."""
