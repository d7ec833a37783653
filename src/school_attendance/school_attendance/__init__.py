"""School attendance package.

Turns identity-card punches from field readers into one daily attendance
state per student or staff member. Organized by feature modules (cards,
punches, attendance, ...) with a thin Flask controller layer on top of
service/repository layers.
"""
