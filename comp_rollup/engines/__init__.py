"""
Engines package for the compensation rollup.

Pure per-employee calculations: currency conversion, increase rounding,
flagging, market position and increase resolution.
"""
