from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime, date

GenderPreference = Literal["any", "male", "female"]
RentalType = Literal["apartment", "house", "room", "basement", "floor"]


class ListingCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    address: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    bedrooms: int = Field(..., ge=0)
    bathrooms: float = Field(..., ge=0)
    is_on_campus: bool = False
    gender_preference: GenderPreference = "any"
    rental_type: RentalType
    image_urls: List[str] = []
    amenities: List[str] = []
    available_from: Optional[date] = None
    lease_duration: Optional[str] = None


class ListingUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    is_on_campus: Optional[bool] = None
    gender_preference: Optional[GenderPreference] = None
    rental_type: Optional[RentalType] = None
    image_urls: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    available_from: Optional[date] = None
    lease_duration: Optional[str] = None


class ListingResponse(BaseModel):
    id: str
    landlord_id: str
    title: str
    description: Optional[str] = None
    address: str
    price: float
    bedrooms: int
    bathrooms: float
    is_on_campus: bool = False
    gender_preference: str = "any"
    rental_type: str
    is_verified: bool = False
    image_urls: List[str] = []
    amenities: List[str] = []
    available_from: Optional[date] = None
    lease_duration: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ListingFilters(BaseModel):
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    is_on_campus: Optional[bool] = None
    gender_preference: Optional[GenderPreference] = None
    rental_type: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    # Distance search: all three must be set for it to apply
    target_lat: Optional[float] = None
    target_lng: Optional[float] = None
    radius_km: Optional[float] = None

    @property
    def has_distance(self) -> bool:
        return (
            self.target_lat is not None
            and self.target_lng is not None
            and self.radius_km is not None
            and self.radius_km > 0
        )


class GeocodeResult(BaseModel):
    display_name: str
    lat: float
    lng: float
