"""Application layer – request dispatch, behavior pipeline, validation, masking."""
