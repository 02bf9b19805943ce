# src/analysis/__init__.py — v1
