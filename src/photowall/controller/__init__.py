"""
The CONTROLLER layer: input handling, animation and the gallery orchestration.
Only `workers` depends on Qt; everything else runs head-less.
"""
