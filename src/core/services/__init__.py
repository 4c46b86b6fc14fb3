"""Servicios del Core (orquestación de probes)."""
