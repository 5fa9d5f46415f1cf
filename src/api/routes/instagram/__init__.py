"""Rotas Instagram: webhook Meta e API administrativa."""
