# API Routers
from staypricing.routers import pricing

__all__ = ['pricing']
