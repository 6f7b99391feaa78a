"""Built-in configuration for hcp-to-wiki.

hcpconfig.yaml holds the default post-aggregation system rules.
Loaded by ``config.load_default_config()``.
"""
