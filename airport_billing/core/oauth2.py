from fastapi.security import OAuth2PasswordBearer

# Bearer token from the Authorization header; tokens are issued by the auth service
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
