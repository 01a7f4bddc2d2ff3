"""Source templates for generated embed modules."""
