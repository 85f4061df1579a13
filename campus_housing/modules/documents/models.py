# MongoDB collections: person, group, listing, application
# This file documents the expected document shapes
# Validation is handled in validators.py, persistence in service.py

"""
Expected MongoDB document structure (camelCase keys, as the frontend sends them):

person:
- userId: string (uuid, generated when absent)
- name: string (required, trimmed)
- email: string (required, trimmed)
- password: string (required)
- phone: string (nullable)
- description: string (nullable)
- profilePicture: string (nullable)
- groupId: string (nullable, references group.groupId)
- landlord: bool (default: false)

group:
- groupId: string (uuid, generated when absent)
- userIds: list of strings (default: [])

listing:
- listingId: string (uuid, generated when absent)
- onCampus: bool (default: false)
- price: number (required)
- address: string (required, trimmed)
- bedrooms: number (required)
- bathrooms: number (required)
- gender: string (nullable)
- rentalType: string (required)
- verified: bool (default: false)
- imageUrls: list of strings (default: [])
- landlordId: string (required, references person.userId)

application:
- applicationId: string (uuid, generated when absent)
- listingId: string (required, references listing.listingId)
- groupId: string (required, references group.groupId)
"""
