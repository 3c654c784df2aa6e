"""
Custom AutoSchema for automatic tag assignment
"""
from drf_spectacular.openapi import AutoSchema


class CustomAutoSchema(AutoSchema):
    """
    Custom schema that automatically assigns tags based on ViewSet and action
    """

    def get_tags(self):
        """Auto-assign tags based on ViewSet class and action"""
        tags = super().get_tags()

        if tags:
            return tags

        view = self.view
        view_name = view.__class__.__name__
        action = getattr(view, 'action', None)

        # Map ViewSets to tags
        tag_mapping = {
            'ShopViewSet': self._get_shop_tag(action),
            'BarberViewSet': ['Barbers'],
            'BarberWeeklyScheduleViewSet': ['Schedules - Shop Owner'],
            'BarberSpecialHoursViewSet': ['Schedules - Shop Owner'],
            'ScheduleViewSet': ['Schedules - Public'],
            'BookingViewSet': self._get_booking_tag(action),
            'SettlementViewSet': ['Finance - Admin'],
            'SystemConfigView': ['Finance - Admin'],
        }

        return tag_mapping.get(view_name, ['api'])

    def _get_shop_tag(self, action):
        """Get tag for shop endpoints"""
        public_actions = ['list', 'retrieve', 'earliest_slot']
        if action in public_actions:
            return ['Shops - Public']
        return ['Shops - Owner']

    def _get_booking_tag(self, action):
        """Get tag for booking endpoints"""
        owner_actions = ['shop_bookings', 'update_status']
        if action in owner_actions:
            return ['Bookings - Shop Owner']
        return ['Bookings - Customer']
