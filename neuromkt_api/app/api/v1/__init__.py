"""
Version 1 of the Neuromkt API.
"""
