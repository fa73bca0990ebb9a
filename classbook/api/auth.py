from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from classbook.api.deps import get_db
from classbook.schemas.user import UserLogin, Token
from classbook.crud import user as crud_user
from classbook.core.security import verify_password, create_access_token

router = APIRouter()


@router.post("/login", response_model=Token)
def login(form: UserLogin, db: Session = Depends(get_db)):
    user = crud_user.get_user_by_email(db, form.email)
    if not user or not verify_password(form.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Неверный email или пароль")
    access_token = create_access_token(data={"sub": user.email, "role": user.role})
    return {"access_token": access_token, "token_type": "bearer"}
