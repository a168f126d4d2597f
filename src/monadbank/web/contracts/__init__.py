"""Request/response models for the form endpoints."""
