"""
Service layer: table loading/lookup and export payload generation.
"""
