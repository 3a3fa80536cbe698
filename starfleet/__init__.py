"""Starfleet tactical simulator: Battleship against a hunt/target opponent."""
