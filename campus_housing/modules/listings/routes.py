from fastapi import APIRouter, Depends, HTTPException, Query
from campus_housing.database.supabase_client import get_supabase
from campus_housing.modules.listings.schemas import (
    ListingCreate, ListingUpdate, ListingResponse, ListingFilters,
    GeocodeResult, GenderPreference
)
from campus_housing.modules.listings.service import ListingService
from campus_housing.modules.listings.geocoding import Geocoder, GeocodingError, get_geocoder
from campus_housing.core.dependencies import get_current_user_id, require_landlord, check_listing_owner
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/listings", tags=["listings"])


def get_listing_service(
    supabase: Client = Depends(get_supabase),
    geocoder: Geocoder = Depends(get_geocoder)
) -> ListingService:
    return ListingService(supabase, geocoder)


@router.get("", response_model=List[ListingResponse])
def list_listings(
    price_min: Optional[float] = None,
    price_max: Optional[float] = None,
    bedrooms: Optional[int] = None,
    bathrooms: Optional[float] = None,
    is_on_campus: Optional[bool] = None,
    gender_preference: Optional[GenderPreference] = None,
    rental_type: Optional[List[str]] = Query(None),
    amenities: Optional[List[str]] = Query(None),
    target_lat: Optional[float] = Query(None, ge=-90, le=90),
    target_lng: Optional[float] = Query(None, ge=-180, le=180),
    radius_km: Optional[float] = Query(None, gt=0),
    service: ListingService = Depends(get_listing_service)
):
    """Browse listings. Distance search applies when target_lat, target_lng and radius_km are all given."""
    filters = ListingFilters(
        price_min=price_min,
        price_max=price_max,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        is_on_campus=is_on_campus,
        gender_preference=gender_preference,
        rental_type=rental_type,
        amenities=amenities,
        target_lat=target_lat,
        target_lng=target_lng,
        radius_km=radius_km,
    )
    return service.get_listings(filters)


@router.get("/mine", response_model=List[ListingResponse])
async def list_my_listings(
    landlord: Dict = Depends(require_landlord),
    service: ListingService = Depends(get_listing_service)
):
    """Listings owned by the authenticated landlord"""
    return service.get_landlord_listings(landlord["id"])


@router.get("/geocode", response_model=List[GeocodeResult])
def geocode_address(
    q: str = "",
    geocoder: Geocoder = Depends(get_geocoder)
):
    """Look up candidate coordinates for an address (search centre for distance filtering)"""
    try:
        return geocoder.search(q)
    except GeocodingError:
        raise HTTPException(status_code=502, detail="Unable to geocode that address right now.")


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: str,
    service: ListingService = Depends(get_listing_service)
):
    """Get listing by ID"""
    return service.get_listing(listing_id)


@router.post("", response_model=ListingResponse, status_code=201)
async def create_listing(
    listing_data: ListingCreate,
    landlord: Dict = Depends(require_landlord),
    service: ListingService = Depends(get_listing_service)
):
    """Create a listing (landlords only)"""
    return service.create_listing(listing_data, landlord["id"])


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: str,
    listing_data: ListingUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: ListingService = Depends(get_listing_service),
    supabase: Client = Depends(get_supabase)
):
    """Update a listing (owning landlord only)"""
    check_listing_owner(listing_id, current_user, supabase)
    return service.update_listing(listing_id, listing_data)


@router.delete("/{listing_id}", status_code=204)
async def delete_listing(
    listing_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: ListingService = Depends(get_listing_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete a listing (owning landlord only)"""
    check_listing_owner(listing_id, current_user, supabase)
    service.delete_listing(listing_id)
    return None
