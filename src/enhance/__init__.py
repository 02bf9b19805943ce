# src/enhance/__init__.py — v1
