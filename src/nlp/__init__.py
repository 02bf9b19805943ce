# src/nlp/__init__.py — v1
