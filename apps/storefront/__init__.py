"""Jewelry storefront: gold-indexed product listing API and carousel client."""
