"""Webhook verification and dispatch."""
