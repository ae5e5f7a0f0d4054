"""Подсистема безопасности: ECIES-HKDF recipient KEM."""
