from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from simplylearn.core.current_user import get_current_user
from simplylearn.core.deps import get_db
from simplylearn.models.user import User
from simplylearn.schemas.dashboard import DashboardStats
from simplylearn.services.dashboard import dashboard_stats

router = APIRouter()


@router.get("", response_model=DashboardStats)
def get_dashboard(
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    return dashboard_stats(db, me)
