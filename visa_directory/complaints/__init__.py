"""
Complaint reports filed by visitors against listed businesses.

Responsibilities:
- Accept new reports in a pending state for moderation.
- Publish only approved reports, with the reporter name masked.
- Count approved reports per business for the "reports" sort.
"""
