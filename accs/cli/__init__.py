"""
CLI for the ACCS engine
"""
