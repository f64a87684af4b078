from credit_system.models.customer import Address, Customer
from credit_system.models.credit import Credit, CreditStatus
