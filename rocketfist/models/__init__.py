from .gym import GymRole, STAFF_ROLES, MANAGER_ROLES, Gym, UserProfile, GymUser
from .class_template import ClassTemplate, ClassScheduleSlot
from .class_instance import InstanceStatus, ClassInstance
from .registration import RegistrationStatus, CAPACITY_STATUSES, Registration
from .membership import MembershipStatus, MembershipPlan, Membership
from .payment import PaymentStatus, Payment
