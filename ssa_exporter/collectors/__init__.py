"""
Collectors package for the Smart Storage Array exporter.

Available collectors:
- array_collector.py: One poll cycle over all controllers (discovery + logical drives)
"""
