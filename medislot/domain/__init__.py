"""Domain packages: availability, bookings, doctors and patients"""
