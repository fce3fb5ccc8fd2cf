"""Fixed replies sent verbatim, without the language model."""

RESTART_COMMAND = "/start"

GREETING = (
    "Hello! I'm your car insurance assistant. I'll help you buy a policy "
    "in a few minutes.\n"
    "To begin, please send a clear photo of your passport."
)

IDENTITY_DOCUMENT_RECEIVED = (
    "Passport photo received.\n"
    "Now send a photo of your vehicle identification document."
)

VEHICLE_DOCUMENT_RECEIVED = (
    "Vehicle document received.\n"
    "Processing your information..."
)

SUMMARY = (
    "Here's what I found:\n"
    "Name: {name}\n"
    "Passport ID: {passport_number}\n"
    "Vehicle ID: {vehicle_number}\n\n"
    "Is this information correct?"
)

SESSION_EXPIRED = (
    "Sorry, your session has expired and your document data is no longer "
    "available. Please send a photo of your passport to start again."
)

THANK_YOU = (
    "Thank you for choosing us! Your policy has been issued.\n"
    f"Send {RESTART_COMMAND} if you want to insure another vehicle."
)

APOLOGY = "Sorry, something went wrong on our side. Please try again."
