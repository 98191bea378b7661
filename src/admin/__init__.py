"""
Administration module: registration approval workflow and admin endpoints.
"""
