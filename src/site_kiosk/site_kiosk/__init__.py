"""Site Kiosk package.

Offline-capable site sign-in/sign-out kiosk. Organized by feature modules
(workers, visits, roster, attendance, reports, settings) with a thin Flask
controller layer over service/repository layers.
"""
