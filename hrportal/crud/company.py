from datetime import datetime, timezone

from sqlalchemy.orm import Session

from hrportal.crud.base import CRUDBase
from hrportal.models.company import Company


class CRUDCompany(CRUDBase[Company]):
    def update_admin(self, db: Session, company: Company, admin_id: int, *, commit: bool = True) -> Company:
        company.admin_id = admin_id
        company.updated_at = datetime.now(timezone.utc)
        db.add(company)
        if commit:
            db.commit(); db.refresh(company)
        return company


company_crud = CRUDCompany(Company)
