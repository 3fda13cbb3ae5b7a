"""Zoomable, semantically scaled scatter plot of labeled cell embeddings."""
