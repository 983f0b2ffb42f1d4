"""Standalone NiceGUI front end for boxplot and polar charts."""
