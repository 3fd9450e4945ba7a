"""Bookings domain - Booking records and the check-in lifecycle"""
