# src/vocab/__init__.py — v1
