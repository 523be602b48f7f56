"""Outer surfaces over the engine session: REST API and terminal play."""
