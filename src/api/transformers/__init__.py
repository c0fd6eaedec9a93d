"""Response transformers."""
