from crm.models.customer import Customer
from crm.models.employee import Employee
from crm.models.inventory import InventoryItem
from crm.models.order import Order
from crm.models.quote import Quote
from crm.models.schedule import Schedule
from crm.schemas.customer import CustomerOut
from crm.schemas.employee import EmployeeOut
from crm.schemas.inventory import InventoryItemOut
from crm.schemas.order import OrderOut
from crm.schemas.quote import QuoteOut
from crm.schemas.schedule import ScheduleOut


def build_customer_response(customer: Customer) -> CustomerOut:
    return CustomerOut(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        address=customer.address,
        city=customer.city,
        state=customer.state,
        zip_code=customer.zip_code,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
    )


def build_inventory_item_response(item: InventoryItem) -> InventoryItemOut:
    return InventoryItemOut(
        id=item.id,
        name=item.name,
        description=item.description,
        category=item.category,
        quantity=item.quantity,
        unit_price=item.unit_price,
        sku=item.sku,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def build_employee_response(employee: Employee) -> EmployeeOut:
    return EmployeeOut(
        id=employee.id,
        name=employee.name,
        email=employee.email,
        phone=employee.phone,
        role=employee.role,
        is_active=employee.is_active,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


def build_order_response(order: Order) -> OrderOut:
    return OrderOut(
        id=order.id,
        customer_id=order.customer_id,
        customer_name=order.customer.name if order.customer else None,
        order_number=order.order_number,
        status=order.status,
        pickup_address=order.pickup_address,
        delivery_address=order.delivery_address,
        pickup_date=order.pickup_date,
        delivery_date=order.delivery_date,
        dog_name=order.dog_name,
        dog_breed=order.dog_breed,
        dog_weight=order.dog_weight,
        special_instructions=order.special_instructions,
        total_amount=order.total_amount,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def build_quote_response(quote: Quote) -> QuoteOut:
    return QuoteOut(
        id=quote.id,
        customer_id=quote.customer_id,
        customer_name=quote.customer.name if quote.customer else None,
        quote_number=quote.quote_number,
        status=quote.status,
        dog_name=quote.dog_name,
        dog_breed=quote.dog_breed,
        dog_weight=quote.dog_weight,
        departure_city=quote.departure_city,
        destination_city=quote.destination_city,
        travel_date=quote.travel_date,
        flight_cost=quote.flight_cost,
        boarding_cost=quote.boarding_cost,
        medical_cost=quote.medical_cost,
        additional_fees=quote.additional_fees,
        total_amount=quote.total_amount,
        notes=quote.notes,
        valid_until=quote.valid_until,
        order_id=quote.order_id,
        created_at=quote.created_at,
        updated_at=quote.updated_at,
    )


def build_schedule_response(schedule: Schedule) -> ScheduleOut:
    return ScheduleOut(
        id=schedule.id,
        employee_id=schedule.employee_id,
        employee_name=schedule.employee.name if schedule.employee else None,
        order_id=schedule.order_id,
        order_number=schedule.order.order_number if schedule.order else None,
        schedule_type=schedule.schedule_type,
        scheduled_date=schedule.scheduled_date,
        scheduled_time=schedule.scheduled_time,
        address=schedule.address,
        status=schedule.status,
        notes=schedule.notes,
        completed_at=schedule.completed_at,
        created_at=schedule.created_at,
        updated_at=schedule.updated_at,
    )


def build_customer_response_list(customers: list) -> list:
    return [build_customer_response(customer) for customer in customers]


def build_inventory_item_response_list(items: list) -> list:
    return [build_inventory_item_response(item) for item in items]


def build_employee_response_list(employees: list) -> list:
    return [build_employee_response(employee) for employee in employees]


def build_order_response_list(orders: list) -> list:
    return [build_order_response(order) for order in orders]


def build_quote_response_list(quotes: list) -> list:
    return [build_quote_response(quote) for quote in quotes]


def build_schedule_response_list(schedules: list) -> list:
    return [build_schedule_response(schedule) for schedule in schedules]
