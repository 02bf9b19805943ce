# src/indexer/__init__.py — v1
