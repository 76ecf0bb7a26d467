from pydantic import BaseModel


class ContactInfo(BaseModel):
    business_name: str
    tagline: str
    phone: str
    whatsapp_link: str
    catering_inquiry_link: str
