"""Static reference data"""
