def get_db_models():
    """
    Dynamically import models to avoid circular imports.
    Returns list of SQLAlchemy models for registration or other purposes.
    """
    from models.registration import BusinessRegistrationRequest, ReviewEvent
    from models.business import Business, BusinessCompany, BusinessUnit
    from models.location import BusinessLocation, LocationAdmin
    from models.promotion import BusinessPromotion, promotion_locations

    return [
        BusinessRegistrationRequest,
        ReviewEvent,
        Business,
        BusinessCompany,
        BusinessUnit,
        BusinessLocation,
        LocationAdmin,
        BusinessPromotion,
        promotion_locations,
    ]
