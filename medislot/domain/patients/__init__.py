"""Patients domain - Patient records and push tokens"""
