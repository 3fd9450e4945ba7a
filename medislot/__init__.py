"""MediSlot - doctor appointment booking backend"""
