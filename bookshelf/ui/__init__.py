"""Couche d'interface Tkinter."""
