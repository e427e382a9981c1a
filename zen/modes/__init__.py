"""
Mode framework: the stone entity, the mode lifecycle contract, shared
helpers and the mode manager.
"""
