"""legacy-vault: digital asset, nominee and well-being check-in service."""
