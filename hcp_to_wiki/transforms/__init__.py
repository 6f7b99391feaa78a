"""
Transforms sub-package for hcp-to-wiki.

Steps applied to validated advert records:
  - aggregate.py: Build the per-system minimum-price series by quarter.
  - rules.py: Rename or suppress systems according to the configured rules.
  - pipeline.py: Run record building, aggregation and rules in sequence.
"""
