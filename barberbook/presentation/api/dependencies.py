"""
Dependencias inyectadas en los endpoints.
Los tests las sustituyen con app.dependency_overrides.
"""
from barberbook.infrastructure.config.settings import GoogleOAuthCredentials, get_google_credentials
from barberbook.infrastructure.persistence.supabase_service import SupabaseService, supabase_service

def get_store() -> SupabaseService:
    return supabase_service

def get_google_oauth() -> GoogleOAuthCredentials:
    return get_google_credentials()
