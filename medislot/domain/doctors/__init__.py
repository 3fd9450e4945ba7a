"""Doctors domain - Registry, approval workflow and dashboard views"""
