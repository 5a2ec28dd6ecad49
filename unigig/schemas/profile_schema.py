from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StudentProfileCreate(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=200)
    bio: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=50)
    university: Optional[str] = Field(None, max_length=200)
    major: Optional[str] = Field(None, max_length=200)
    year_of_study: Optional[int] = Field(None, ge=1, le=10)
    skills: Optional[List[str]] = None


class StudentProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=200)
    bio: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=50)
    university: Optional[str] = Field(None, max_length=200)
    major: Optional[str] = Field(None, max_length=200)
    year_of_study: Optional[int] = Field(None, ge=1, le=10)
    skills: Optional[List[str]] = None


class StudentProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    full_name: str
    bio: Optional[str] = None
    phone: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    year_of_study: Optional[int] = None
    skills: Optional[List[str]] = None
    resume_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EmployerProfileCreate(BaseModel):
    company_name: str = Field(..., min_length=2, max_length=200)
    company_description: Optional[str] = None
    industry: Optional[str] = Field(None, max_length=200)
    website: Optional[str] = Field(None, max_length=500)
    contact_person: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)


class EmployerProfileUpdate(BaseModel):
    company_name: Optional[str] = Field(None, min_length=2, max_length=200)
    company_description: Optional[str] = None
    industry: Optional[str] = Field(None, max_length=200)
    website: Optional[str] = Field(None, max_length=500)
    contact_person: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)


class EmployerProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    company_name: str
    company_description: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
