"""Availability domain - Doctor slot inventories, slot catalog and calendar views"""
