"""HTTP front end for the shape canvas engine."""
