GUESTS_URL = "/api/guests"
GUEST_DETAIL_URL = "/api/guests/{guest_id}"
