class FlowKeys:
    """Identifiers of the shipped wizard flows."""

    SIGNUP = "signup"
    PERSONAL_INFO = "personal_info"
    CREATE_EVENT = "create_event"
    EDUCATION_ROLE = "education_role"


class SignupKeys:
    """Fields of the signup screen, carried into personal info."""

    NAME = "name"
    EMAIL = "email"
    COUNTRY_CODE = "country_code"
    MOBILE_NUMBER = "mobile_number"
    PASSWORD = "password"


class ProfileKeys:
    """Plain fields of the personal-info flow."""

    FULL_NAME = "full_name"
    EMAIL = "email"
    MOBILE_NUMBER = "mobile_number"
    COUNTRY_CODE = "country_code"
    GENDER = "gender"
    DATE_OF_BIRTH = "date_of_birth"
    ABOUT_ME = "about_me"
    SKILLS = "skills"
    GOALS = "goals"
    NETWORK_VISIBILITY = "network_visibility"
    PASSWORD = "password"


class SectionKeys:
    """Repeatable sections."""

    EDUCATIONS = "educations"
    ROLES = "roles"


class EducationKeys:
    SCHOOL_UNIVERSITY = "school_university"
    DEGREE_PROGRAM = "degree_program"
    START_YEAR = "start_year"
    END_YEAR = "end_year"
    CURRENTLY_ENROLLED = "currently_enrolled"
    GRADE = "grade"


class RoleKeys:
    CURRENT_ROLE = "current_role"
    COMPANY_ORGANISATION = "company_organisation"
    START_DATE = "start_date"
    END_DATE = "end_date"
    CURRENTLY_WORKING = "currently_working"
    LOCATION = "location"
    DESCRIPTION = "description"


class EventKeys:
    """Fields of the create-event flow."""

    EVENT_NAME = "event_name"
    HOST_BY = "host_by"
    EVENT_DATE = "event_date"
    FROM_TIME = "from_time"
    TO_TIME = "to_time"
    DESCRIPTION = "description"
    EVENT_MODE = "event_mode"
    CATEGORY = "category"
    EVENT_TYPE = "event_type"
    INVITED_FRIENDS = "invited_friends"
    THUMBNAIL_URI = "thumbnail_uri"


class PreferenceKeys:
    """Keys in the injected preferences repository."""

    SELECTED_FRIENDS = "@kalon_selected_friends"
