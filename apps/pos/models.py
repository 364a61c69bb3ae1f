from django.db import models


class PosTabState(models.Model):
    """
    Saved open tabs of one operator at one café.

    ``data`` is the JSON form of a TabRegistry. It is read at the start of
    every POS request and written back at the end of it.
    """

    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='pos_tab_states'
    )
    cafe = models.ForeignKey(
        'cafes.Cafe',
        on_delete=models.CASCADE,
        related_name='pos_tab_states'
    )
    data = models.JSONField(default=dict)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pos_tab_states'
        constraints = [
            models.UniqueConstraint(fields=['user', 'cafe'], name='pos_tab_state_unique_user_cafe'),
        ]

    def __str__(self):
        return f"{self.user} @ {self.cafe}"
