# schemeteller/engine/types.py
import enum


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class Category(str, enum.Enum):
    GENERAL = "GENERAL"
    OBC = "OBC"
    SC = "SC"
    ST = "ST"
    EWS = "EWS"


class Occupation(str, enum.Enum):
    SALARIED = "SALARIED"
    SELF_EMPLOYED = "SELF_EMPLOYED"
    FARMER = "FARMER"
    STUDENT = "STUDENT"
    UNEMPLOYED = "UNEMPLOYED"
    RETIRED = "RETIRED"
    OTHER = "OTHER"


class IncomeBracket(str, enum.Enum):
    BELOW_1L = "BELOW_1L"
    FROM_1L_TO_2_5L = "1L_TO_2_5L"
    FROM_2_5L_TO_5L = "2_5L_TO_5L"
    FROM_5L_TO_8L = "5L_TO_8L"
    FROM_8L_TO_10L = "8L_TO_10L"
    ABOVE_10L = "ABOVE_10L"


class SchemeStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    ARCHIVED = "ARCHIVED"


class SchemeLevel(str, enum.Enum):
    CENTRAL = "CENTRAL"
    STATE = "STATE"


class Region(str, enum.Enum):
    # 28 states
    ANDHRA_PRADESH = "ANDHRA_PRADESH"
    ARUNACHAL_PRADESH = "ARUNACHAL_PRADESH"
    ASSAM = "ASSAM"
    BIHAR = "BIHAR"
    CHHATTISGARH = "CHHATTISGARH"
    GOA = "GOA"
    GUJARAT = "GUJARAT"
    HARYANA = "HARYANA"
    HIMACHAL_PRADESH = "HIMACHAL_PRADESH"
    JHARKHAND = "JHARKHAND"
    KARNATAKA = "KARNATAKA"
    KERALA = "KERALA"
    MADHYA_PRADESH = "MADHYA_PRADESH"
    MAHARASHTRA = "MAHARASHTRA"
    MANIPUR = "MANIPUR"
    MEGHALAYA = "MEGHALAYA"
    MIZORAM = "MIZORAM"
    NAGALAND = "NAGALAND"
    ODISHA = "ODISHA"
    PUNJAB = "PUNJAB"
    RAJASTHAN = "RAJASTHAN"
    SIKKIM = "SIKKIM"
    TAMIL_NADU = "TAMIL_NADU"
    TELANGANA = "TELANGANA"
    TRIPURA = "TRIPURA"
    UTTAR_PRADESH = "UTTAR_PRADESH"
    UTTARAKHAND = "UTTARAKHAND"
    WEST_BENGAL = "WEST_BENGAL"

    # 8 union territories
    ANDAMAN_NICOBAR = "ANDAMAN_NICOBAR"
    CHANDIGARH = "CHANDIGARH"
    DADRA_NAGAR_HAVELI_DAMAN_DIU = "DADRA_NAGAR_HAVELI_DAMAN_DIU"
    DELHI = "DELHI"
    JAMMU_KASHMIR = "JAMMU_KASHMIR"
    LADAKH = "LADAKH"
    LAKSHADWEEP = "LAKSHADWEEP"
    PUDUCHERRY = "PUDUCHERRY"
