#!/usr/bin/env python3
"""
jmrel Quickstart Example
========================
Demonstrates core functionality in a few lines.
"""

from jmrel import JelinskiMorandaModel, estimate_parameters, parse_intervals

# 1. Quick estimate (one line)
estimate = estimate_parameters([10, 20, 30])
print(f"B = {estimate.b:.4f} | K = {estimate.k:.6f}")

# 2. From pasted text, with a forecast
seq = parse_intervals("7, 11, 8, 10, 15, 22, 20, 25, 28, 35")
model = JelinskiMorandaModel()
result = model.fit(seq)
print(result.summary())
print(f"Next intervals: {model.predict_intervals(3)}")

# 3. Cumulative failure times
estimate = estimate_parameters(parse_intervals("10 30 60", cumulative=True))
print(f"Time to end of testing: {estimate.time_to_end_of_testing:.2f}")
