"""Redfin member preferences API."""
