"""PetroHub API service: versioned REST skeleton with result envelopes,
global error mapping, request culture resolution and an auditing data context."""
