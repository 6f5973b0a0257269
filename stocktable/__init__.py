"""Stocktable: portfolio table viewer with CSV upload and swappable storage."""
