from django.db.models.signals import post_save, post_delete, pre_save
from django.dispatch import receiver

from .models import Contact, Review
from .services import recompute_review_score


@receiver(pre_save, sender=Review)
def remember_previous_contact(sender, instance, **kwargs):
    """Keep the old contact so a reassigned review updates both scores."""
    instance._previous_contact_id = None
    if instance.pk:
        instance._previous_contact_id = (
            Review.objects.filter(pk=instance.pk).values_list("contact_id", flat=True).first()
        )


@receiver(post_save, sender=Review)
def refresh_score_on_save(sender, instance, **kwargs):
    contact_ids = {instance.contact_id, getattr(instance, "_previous_contact_id", None)}
    for contact in Contact.objects.filter(id__in=[cid for cid in contact_ids if cid]):
        recompute_review_score(contact)


@receiver(post_delete, sender=Review)
def refresh_score_on_delete(sender, instance, **kwargs):
    if not instance.contact_id:
        return
    contact = Contact.objects.filter(id=instance.contact_id).first()
    if contact is not None:
        recompute_review_score(contact)
