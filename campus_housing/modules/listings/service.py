import logging
from supabase import Client
from campus_housing.modules.listings.schemas import (
    ListingCreate, ListingUpdate, ListingResponse, ListingFilters
)
from campus_housing.modules.listings.geocoding import Geocoder, GeocodingError, haversine_km
from typing import List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ListingService:
    def __init__(self, supabase: Client, geocoder: Optional[Geocoder] = None):
        self.supabase = supabase
        self.geocoder = geocoder

    def _apply_filters(self, query, filters: ListingFilters):
        if filters.price_min is not None:
            query = query.gte("price", filters.price_min)
        if filters.price_max is not None:
            query = query.lte("price", filters.price_max)
        if filters.bedrooms is not None:
            query = query.eq("bedrooms", filters.bedrooms)
        if filters.bathrooms is not None:
            query = query.eq("bathrooms", filters.bathrooms)
        if filters.is_on_campus is not None:
            query = query.eq("is_on_campus", filters.is_on_campus)
        if filters.gender_preference and filters.gender_preference != "any":
            query = query.eq("gender_preference", filters.gender_preference)
        if filters.rental_type:
            query = query.in_("rental_type", filters.rental_type)
        if filters.amenities:
            query = query.contains("amenities", filters.amenities)
        return query

    def _within_radius(self, listings: List[ListingResponse], filters: ListingFilters) -> List[ListingResponse]:
        """Keep listings whose geocoded address lies within filters.radius_km"""
        if self.geocoder is None:
            raise HTTPException(status_code=500, detail="Distance search is not configured")
        nearby = []
        for listing in listings:
            coords = self.geocoder.geocode(listing.address)
            if coords is None:
                continue
            distance = haversine_km(filters.target_lat, filters.target_lng, coords[0], coords[1])
            if distance <= filters.radius_km:
                nearby.append(listing)
        return nearby

    def get_listings(self, filters: Optional[ListingFilters] = None) -> List[ListingResponse]:
        """List listings matching the filters, newest first"""
        filters = filters or ListingFilters()
        try:
            query = self._apply_filters(self.supabase.table("listings").select("*"), filters)
            result = query.order("created_at", desc=True).execute()
            listings = [ListingResponse(**listing) for listing in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not filters.has_distance:
            return listings
        try:
            return self._within_radius(listings, filters)
        except GeocodingError:
            raise HTTPException(status_code=502, detail="Unable to geocode listings right now.")

    def get_listing(self, listing_id: str) -> ListingResponse:
        """Get listing by ID"""
        try:
            result = self.supabase.table("listings")\
                .select("*")\
                .eq("id", listing_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Listing not found")

            return ListingResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_listing(self, listing_data: ListingCreate, landlord_id: str) -> ListingResponse:
        """Create a listing owned by the given landlord"""
        try:
            payload = listing_data.model_dump(mode="json")
            payload["address"] = payload["address"].strip()
            payload["landlord_id"] = landlord_id

            result = self.supabase.table("listings").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create listing")

            logger.info(f"Landlord {landlord_id} created listing {result.data[0]['id']}")
            return ListingResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_listing(self, listing_id: str, listing_data: ListingUpdate) -> ListingResponse:
        """Update listing; only provided fields are written"""
        try:
            update_data = listing_data.model_dump(mode="json", exclude_none=True)

            if not update_data:
                # No changes, return existing
                return self.get_listing(listing_id)

            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("listings")\
                .update(update_data)\
                .eq("id", listing_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Listing not found")

            return ListingResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_listing(self, listing_id: str) -> bool:
        """Delete listing"""
        try:
            result = self.supabase.table("listings")\
                .delete()\
                .eq("id", listing_id)\
                .execute()

            deleted = len(result.data) > 0
            if deleted:
                logger.info(f"Deleted listing {listing_id}")
            return deleted
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_landlord_listings(self, landlord_id: str) -> List[ListingResponse]:
        """All listings owned by a landlord, newest first"""
        try:
            result = self.supabase.table("listings")\
                .select("*")\
                .eq("landlord_id", landlord_id)\
                .order("created_at", desc=True)\
                .execute()

            return [ListingResponse(**listing) for listing in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
