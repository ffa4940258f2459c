"""Best-effort re-hosting of generated images."""
