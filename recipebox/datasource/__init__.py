"""
Data sources built on the service layer.
"""
