"""
Rating aggregation.

Responsibilities:
- Model the two review scales (professional hearts, establishment stars)
  as distinct review types.
- Reduce reviews to a per-subject average with half-up rounding.
"""
