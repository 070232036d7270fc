"""Request, upload, mail and avatar helpers."""
