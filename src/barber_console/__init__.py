"""Barber Console package.

Management console for a barbershop, organized by feature modules (attendance,
clients, catalog, reports, ...) with a thin Flask controller layer on top of
service/repository layers. Data lives in the remote barbershop API; repositories
here are HTTP gateways to it.
"""
