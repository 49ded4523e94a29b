"""Blog Posts Backend."""
