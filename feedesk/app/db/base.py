from feedesk.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from feedesk.app.models.fee_payment import FeePayment  # noqa: F401
from feedesk.app.models.fee_payment_item import FeePaymentItem  # noqa: F401
from feedesk.app.models.expenditure import Expenditure  # noqa: F401
