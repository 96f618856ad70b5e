"""Catalog of books, authors, genres and book copies."""
