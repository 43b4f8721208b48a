"""Rendering — kida templates, content loaders and the site renderer."""
