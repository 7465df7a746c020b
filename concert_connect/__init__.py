"""
Project package for the Concert Connect backend.
"""
