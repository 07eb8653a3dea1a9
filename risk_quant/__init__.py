"""Quantitative risk analysis for project risk and opportunity registers."""
