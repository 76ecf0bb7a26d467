from fastapi import APIRouter

from caterhub.core.config import settings
from caterhub.schemas.contact import ContactInfo
from caterhub.services.messaging import catering_inquiry_link, whatsapp_link

router = APIRouter()


@router.get("/", response_model=ContactInfo)
async def get_contact_info():
    return ContactInfo(
        business_name=settings.business_name,
        tagline=settings.business_tagline,
        phone=settings.business_phone,
        whatsapp_link=whatsapp_link(),
        catering_inquiry_link=catering_inquiry_link(),
    )
