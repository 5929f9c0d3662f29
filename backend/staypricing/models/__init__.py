# Ontology Models
from staypricing.models.ontology import Property, Room, PricingRule

__all__ = ['Property', 'Room', 'PricingRule']
