"""B2B marketplace interaction engine: negotiation, split shipment, and product comparison."""
