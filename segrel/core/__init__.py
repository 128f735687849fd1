"""Implementation package for segrel; prefer the flat ``segrel`` namespace."""
