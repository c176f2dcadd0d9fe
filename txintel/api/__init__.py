"""HTTP surface and response shaping."""
